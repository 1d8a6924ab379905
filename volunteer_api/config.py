from pydantic import BaseModel
import os
from urllib.parse import quote_plus
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseModel):
    DB_USER: str | None = os.getenv("DB_USER")
    DB_PASS: str | None = os.getenv("DB_PASS")
    MONGO_HOST: str = os.getenv("MONGO_HOST", "swajan48.9pzqlth.mongodb.net")
    MONGO_APP_NAME: str = os.getenv("MONGO_APP_NAME", "Swajan48")
    MONGO_URI: str | None = os.getenv("MONGO_URI")
    DB_NAME: str = os.getenv("DB_NAME", "volunteerDb")
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3000"))
    CORS_ORIGINS: list[str] = [
        origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    ]
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def mongo_uri(self) -> str:
        """Explicit MONGO_URI wins, otherwise build the Atlas SRV uri from the credentials."""
        if self.MONGO_URI:
            return self.MONGO_URI
        user = quote_plus(self.DB_USER or "")
        password = quote_plus(self.DB_PASS or "")
        return (
            f"mongodb+srv://{user}:{password}@{self.MONGO_HOST}/"
            f"?retryWrites=true&w=majority&appName={self.MONGO_APP_NAME}"
        )


settings = Settings()
