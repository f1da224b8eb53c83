# 📄 File: eduplatform/modules/auth/domain/__init__.py
# 🧭 Purpose (Layman Explanation):
# The rules of signing in, independent of which service we actually talk to.
# 🧪 Purpose (Technical Summary):
# Domain layer of the auth module: models, events, collaborator contracts and the
# SessionManager service.
# 🔗 Dependencies:
# pydantic, eduplatform.shared.core
# 🔄 Connected Modules / Calls From:
# Auth application and infrastructure layers
