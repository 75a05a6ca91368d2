from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./roofmaster.db"
    COMPANY_NAME: str = "RoofMaster 360"
    SUPPORT_EMAIL: str = "support@roofmaster360.com"

    # Auth
    JWT_SECRET: str = ""  # REQUIRED in production, fail loudly if missing at auth time
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_EXPIRE_MINUTES: int = 60 * 24 * 7
    JWT_REFRESH_EXPIRE_DAYS: int = 30

    # Third-party integrations. Each is optional and endpoints report when missing
    GOOGLE_SOLAR_API_KEY: str = ""
    GOOGLE_MAPS_API_KEY: str = ""
    SHOVELS_API_KEY: str = ""
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_TRANSCRIBE_MODEL: str = "whisper-1"

    # AI assistant: free accounts get this many requests
    FREE_AI_REQUESTS: int = 1

    # Pricing policy overrides (None keeps the built-in value)
    POLICY_PRIMARY_COVERING_FRACTION: Optional[float] = None
    POLICY_WASTE_FACTOR: Optional[float] = None
    POLICY_UNDERLAYMENT_COST_PER_ROLL: Optional[float] = None
    POLICY_ICE_SHIELD_COST_PER_ROLL: Optional[float] = None
    POLICY_DRIP_EDGE_COST_PER_PIECE: Optional[float] = None
    POLICY_STARTER_STRIP_COST_PER_PIECE: Optional[float] = None
    POLICY_RIDGE_CAP_COST_PER_BUNDLE: Optional[float] = None
    POLICY_FLASHING_COST_PER_PIECE: Optional[float] = None
    POLICY_VENT_COST_EACH: Optional[float] = None
    POLICY_NAIL_COST_PER_POUND: Optional[float] = None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def google_api_key(self) -> str:
        return self.GOOGLE_SOLAR_API_KEY or self.GOOGLE_MAPS_API_KEY


settings = Settings()
