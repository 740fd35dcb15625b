import os
from pathlib import Path


class Settings:
    """Application settings with environment variable overrides."""

    APP_NAME: str = "Beverage Distribution Ledgers"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Paths
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    DATA_DIR: Path = Path(os.getenv("DATA_DIR", str(BASE_DIR / "data")))
    DB_PATH: Path = DATA_DIR / "ledger.db"

    # Database
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        f"sqlite+aiosqlite:///{DB_PATH}",
    )

    # CORS
    ALLOWED_ORIGINS: list[str] = [
        o.strip()
        for o in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000,http://localhost").split(",")
        if o.strip()
    ]

    # Role tag attached to every write until sessions carry the real submitter
    DEFAULT_SUBMITTER: str = os.getenv("DEFAULT_SUBMITTER", "Cashier")

    # Business constants
    CURRENCY: str = "UGX"
    MOBILE_PROVIDERS: list[str] = ["MTN", "Airtel"]
    EXPENSE_CATEGORIES: list[str] = [
        "Labour",
        "Salary",
        "Wage",
        "Repairs",
        "Stock",
        "Allowance",
        "Utility/Welfare",
        "Other",
    ]


settings = Settings()
