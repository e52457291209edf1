# 📄 File: app/modules/weather_care/domain/__init__.py
# 🧭 Purpose (Layman Explanation):
# The rules that turn weather into plant care advice.
# 🧪 Purpose (Technical Summary):
# Weather-care domain layer: pydantic models plus the pure recommendation and
# seasonal tip services. No I/O happens here.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# Weather-care application and presentation layers
