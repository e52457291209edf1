# 📄 File: app/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Tells Python this 'app' folder contains the GreenMate care service and records its version.
#
# 🧪 Purpose (Technical Summary):
# Application package initialization with version metadata.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - main.py (application entry point)

"""
GreenMate Care API - plant photo uploads and weather-based care advice.
"""

__version__ = "1.0.0"
__title__ = "GreenMate Care API"
__description__ = "Plant photo normalization and weather-based plant care recommendations"

__all__ = [
    "__version__",
    "__title__",
    "__description__",
]
