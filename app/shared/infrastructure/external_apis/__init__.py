# 📄 File: app/shared/infrastructure/external_apis/__init__.py

# 🧭 Purpose (Layman Explanation):
# The shared toolkit for talking to outside web services such as the weather service.

# 🧪 Purpose (Technical Summary):
# Exports the generic aiohttp-based APIClient and its transport error. Provider clients
# subclass APIClient and translate APIRequestError into their own domain errors.

# 🔗 Dependencies:
# - api_client: Generic single-attempt HTTP client

# 🔄 Connected Modules / Calls From:
# Used by: app.modules.weather_care.infrastructure.external.openweather_client

from .api_client import APIClient, APIRequestError

__all__ = ["APIClient", "APIRequestError"]
