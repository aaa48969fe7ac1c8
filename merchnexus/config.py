from pydantic import BaseModel
from dotenv import load_dotenv
import os

load_dotenv()


class Config(BaseModel):
    # Database
    DATABASE_URL: str
    SQL_ECHO: bool
    CREATE_TABLES: bool

    # JWT
    JWT_SECRET: str
    JWT_ALG: str
    ACCESS_TTL_MIN: int

    # Logging
    LOG_LEVEL: str

    # FastAPI
    FASTAPI_HOST: str
    FASTAPI_PORT: int


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


config = Config(
    DATABASE_URL=os.environ["DATABASE_URL"],
    SQL_ECHO=_flag("SQL_ECHO"),
    CREATE_TABLES=_flag("CREATE_TABLES"),

    JWT_SECRET=os.environ["JWT_SECRET"],
    JWT_ALG=os.getenv("JWT_ALG", "HS256"),
    ACCESS_TTL_MIN=int(os.getenv("ACCESS_TTL_MIN", "15")),

    LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),

    FASTAPI_HOST=os.getenv("FASTAPI_HOST", "0.0.0.0"),
    FASTAPI_PORT=int(os.getenv("FASTAPI_PORT", "2022")),
)

__all__ = ["config"]
