# 📄 File: app/shared/config/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# The settings that tell GreenMate where to store photos, which weather service key to use
# and how strict its limits are.
#
# 🧪 Purpose (Technical Summary):
# Configuration package exporting the pydantic-settings Settings model and its cached factory.
#
# 🔗 Dependencies:
# - settings.py (application settings)
#
# 🔄 Connected Modules / Calls From:
# - app.main (application startup)
# - All modules requiring configuration

from .settings import get_settings, Settings

__all__ = [
    "get_settings",
    "Settings",
]
