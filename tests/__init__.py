import os

# Settings are read at import time; point them at test values before eventhub loads
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///./eventhub_test_default.db"
os.environ["SECRET_KEY"] = "test-jwt-secret"
os.environ["QR_CODE_SECRET"] = "test-qr-secret"
os.environ["FRONTEND_URL"] = "https://events.example.edu/"
