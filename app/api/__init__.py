# 📄 File: app/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# The front door of GreenMate: web routes and the helpers around them.
# 🧪 Purpose (Technical Summary):
# API layer package: versioned routers and middleware.
# 🔗 Dependencies:
# None (package initialization)
# 🔄 Connected Modules / Calls From:
# app.main

"""
GreenMate API Package

Structure:
    api/
    ├── middleware/          # Request logging and error handling
    └── v1/                  # API version 1
        ├── router.py        # Main v1 router factory
        └── health.py        # Health check endpoints
"""
