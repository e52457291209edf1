# 📄 File: app/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# Version 1 of the GreenMate web API.
# 🧪 Purpose (Technical Summary):
# API v1 package exporting the router factory used by the application factory.
# 🔗 Dependencies:
# app.api.v1.router
# 🔄 Connected Modules / Calls From:
# app.main

from .router import create_api_v1_router

API_VERSION = "1.0.0"

__all__ = ["API_VERSION", "create_api_v1_router"]
