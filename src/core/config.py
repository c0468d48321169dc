import os
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from dotenv import load_dotenv


# ==========================================================
# 1) Cargar .env raíz
# ==========================================================
load_dotenv(".env")
DEPLOY_ENV = os.getenv("DEPLOY_ENV", "prod").lower()

# ==========================================================
# 2) Cargar .env del entorno
# ==========================================================
ENV_PATH = f"DevOps/{DEPLOY_ENV}/.env"
load_dotenv(ENV_PATH, override=True)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=ENV_PATH,
        extra="allow"
    )

    # =========================
    #  App
    # =========================
    deploy_env: str = Field("prod")
    app_name: str = Field("snap-barcode-locator")
    app_env: str = Field("prod")
    app_port: int = Field(8000)
    api_enabled: bool = Field(True)

    # =========================
    #  Match pipeline
    # =========================
    cooldown_period: float = Field(0.5)       # segundos entre eventos aceptados
    highlight_duration: float = Field(1.0)    # segundos que dura el resaltado
    haptics_enabled: bool = Field(True)
    initial_serials: str = Field("")          # "SN001, SN002"

    # =========================
    #  Decoder
    # =========================
    decoder_backend: str = Field("zxing")     # zxing | opencv | dummy
    dummy_payloads: str = Field("")

    # =========================
    #  Camera
    # =========================
    camera_url: Optional[str] = Field(None)
    camera_index: int = Field(0)
    camera_id: str = Field("default")
    max_fps: float = Field(15.0)
    frame_sample_interval: int = Field(1)
    warmup_frames: int = Field(0)

    # =========================
    #  Export
    # =========================
    export_dir: str = Field("./exports")
    export_filename: str = Field("ScannedBarcodes.csv")

    # =========================
    #  Monitoring
    # =========================
    prometheus_port: int = Field(9100)


settings = Settings()
