"""
Author: Charm
Copyright (c) 2025, All Rights Reserved.
"""

import os

# Get the absolute path of the project's root directory
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
# Get the absolute path of the backend directory
BE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# Handle different environments: Docker vs local development
if os.path.exists("/app") and os.getcwd().startswith("/app"):
    LOG_DIR = "/app/logs"
else:
    LOG_DIR = os.path.join(BASE_DIR, "logs")

AUTH_LOG_FILE = os.path.join(LOG_DIR, "auth-ldap.log")
LOG_ROTATION = "50 MB"
LOG_RETENTION = "14 days"

# API surface
AUTH_API_PREFIX = "/auth/api/v1"
SERVICE_NAME = "auth-ldap"
