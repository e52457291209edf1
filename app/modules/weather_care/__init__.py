# 📄 File: app/modules/weather_care/__init__.py
# 🧭 Purpose (Layman Explanation):
# Checks the weather where your plants live and tells you what they need today.
# 🧪 Purpose (Technical Summary):
# Weather-care module: OpenWeatherMap client, recommendation engine, seasonal tips
# and the /weather-care HTTP routes.
# 🔗 Dependencies:
# aiohttp (via shared APIClient), pydantic
# 🔄 Connected Modules / Calls From:
# app.api.v1.router, app.main lifespan (weather provider)
