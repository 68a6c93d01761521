"""
nestmart_tests package

Tests for the store service:

- Password hashing, token issue/verify and the role gate (`test_security.py`)
- Login and the protected-route pipeline (`test_auth.py`)
- User registration and administration (`test_users.py`)
- The product catalog end to end (`test_products.py`)
- Configuration loading (`test_config.py`)
- Service banner and health check (`test_health.py`)
- Auth event logging (`test_event_logger.py`)
"""
