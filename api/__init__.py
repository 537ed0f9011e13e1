"""
API Package.

FastAPI surface of the brokerage backend.

Modules:
- main: create_app
- dependencies: ServiceContainer and service getters
- schemas: request/response models
- errors: exception handlers
- routers/: endpoint groups
"""
