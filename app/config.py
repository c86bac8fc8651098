import os


def _env_bool(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class BaseConfig:
    JSON_SORT_KEYS = False
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CORS_ALLOWED_ORIGINS = os.getenv("CORS_ALLOWED_ORIGINS", "*")
    RATELIMIT_STORAGE_URL = os.getenv("RATELIMIT_STORAGE_URL", "memory://")
    OTP_SEND_LIMIT_PER_IP = os.getenv("OTP_SEND_LIMIT_PER_IP", "5 per 15 minutes")
    OTP_SEND_LIMIT_PER_PHONE = os.getenv("OTP_SEND_LIMIT_PER_PHONE", "3 per 15 minutes")
    LOGIN_LIMIT_PER_IP = os.getenv("LOGIN_LIMIT_PER_IP", "10 per 30 minutes")
    ORDER_LIMIT_PER_IP = os.getenv("ORDER_LIMIT_PER_IP", "20 per hour")
    JWT_SECRET = os.getenv("JWT_SECRET", "dev-insecure-jwt-key")
    ACCESS_TOKEN_LIFETIME_MIN = int(os.getenv("ACCESS_TOKEN_LIFETIME_MIN", 15))
    REFRESH_TOKEN_LIFETIME_DAYS = int(os.getenv("REFRESH_TOKEN_LIFETIME_DAYS", 30))
    OTP_EXPIRY_MINUTES = int(os.getenv("OTP_EXPIRY_MINUTES", 10))
    # No SMS gateway: the code is handed back to the requesting client.
    OTP_ECHO_IN_RESPONSE = _env_bool("OTP_ECHO_IN_RESPONSE", True)

    GOOGLE_TRANSLATE_API_KEY = os.getenv("GOOGLE_TRANSLATE_API_KEY", "YOUR_GOOGLE_TRANSLATE_API_KEY")
    GOOGLE_TRANSLATE_BASE_URL = os.getenv(
        "GOOGLE_TRANSLATE_BASE_URL",
        "https://translation.googleapis.com/language/translate/v2",
    )
    TRANSLATE_TIMEOUT_SECONDS = float(os.getenv("TRANSLATE_TIMEOUT_SECONDS", 5))

    EMI_MIN_ORDER_TOTAL = float(os.getenv("EMI_MIN_ORDER_TOTAL", 1000))
    EMI_INSTALLMENTS = int(os.getenv("EMI_INSTALLMENTS", 12))
    DELIVERY_WINDOW_HOURS = int(os.getenv("DELIVERY_WINDOW_HOURS", 5))
    DELIVERY_TICK_SECONDS = float(os.getenv("DELIVERY_TICK_SECONDS", 0.3))
    EXPIRY_ALERT_DAYS = int(os.getenv("EXPIRY_ALERT_DAYS", 15))
    CART_MAX_QUANTITY_PER_ITEM = int(os.getenv("CART_MAX_QUANTITY_PER_ITEM", 100))
    BANNER_ROTATE_SECONDS = int(os.getenv("BANNER_ROTATE_SECONDS", 3))
    AD_BANNER_ROTATE_SECONDS = int(os.getenv("AD_BANNER_ROTATE_SECONDS", 4))

    OTEL_SERVICE_NAME = os.getenv("OTEL_SERVICE_NAME", "viraddhi-storefront")
    OTEL_EXPORTER_OTLP_ENDPOINT = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4318/v1/traces")

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-insecure-key")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///dev.db")

class TestingConfig(BaseConfig):
    TESTING = True
    SECRET_KEY = "test-key"
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    GOOGLE_TRANSLATE_API_KEY = ""

class ProductionConfig(BaseConfig):
    DEBUG = False
    TESTING = False
    SECRET_KEY = os.getenv("SECRET_KEY")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL")

    @staticmethod
    def validate():
        missing = []
        if not os.getenv("SECRET_KEY"):
            missing.append("SECRET_KEY")
        if not os.getenv("DATABASE_URL"):
            missing.append("DATABASE_URL")
        if missing:
            raise RuntimeError(
                f"Missing required env vars in production: {', '.join(missing)}"
            )

def get_config_class():
    env = os.getenv("APP_ENV", "development").lower()
    if env == "production":
        ProductionConfig.validate()
        return ProductionConfig
    if env == "testing":
        return TestingConfig
    return DevelopmentConfig
