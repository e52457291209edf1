# 📄 File: app/shared/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Common tools every part of GreenMate uses: settings, error types, logging, storage
# and the web client for outside services.
#
# 🧪 Purpose (Technical Summary):
# Shared kernel package for configuration, exceptions, rate limiting, logging and
# infrastructure adapters used by the media and weather_care modules.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - All application modules

__all__ = []
