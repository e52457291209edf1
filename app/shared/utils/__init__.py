# 📄 File: app/shared/utils/__init__.py

# 🧭 Purpose (Layman Explanation):
# Helpful tools shared across the app; today that is how GreenMate writes its logs.

# 🧪 Purpose (Technical Summary):
# Utilities package exporting structured logging helpers.

# 🔗 Dependencies:
# - logging: Structured logging utilities

# 🔄 Connected Modules / Calls From:
# Used by: All application modules

from .logging import get_logger, log_context, setup_logging

__all__ = ["get_logger", "log_context", "setup_logging"]
