import os

# Tokens cannot be signed without a secret; real deployments set their own
os.environ.setdefault("JWT_SECRET", "test-secret")
