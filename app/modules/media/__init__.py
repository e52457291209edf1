# 📄 File: app/modules/media/__init__.py
# 🧭 Purpose (Layman Explanation):
# Everything that happens to a plant photo between "the user picked a file" and
# "here is the link to your cleaned-up photo and its thumbnail".
# 🧪 Purpose (Technical Summary):
# Media module: upload validation, Pillow image normalization, thumbnail generation
# and persistence through the shared ObjectStorage backend.
# 🔗 Dependencies:
# Pillow, app.shared.infrastructure.storage, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# app.api.v1.router (uploads router)
