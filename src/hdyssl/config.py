"""Runtime settings, read from the environment (and a local `.env`) at call time."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value else default


@dataclass
class Settings:
    probe_host: str = "google.com"
    testssl_image: str = "drwetter/testssl.sh"
    sslyze_image: str = "nablac0d3/sslyze:5.0.0"
    sslscan_image: str = "sslscan:sslscan"
    sslscan_repo: str = "https://github.com/rbsec/sslscan.git"
    sslscan_clone_dir: str = "sslscan"
    output_dir: str = "."
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            probe_host=_str_env("HDYSSL_PROBE_HOST", cls.probe_host),
            testssl_image=_str_env("HDYSSL_TESTSSL_IMAGE", cls.testssl_image),
            sslyze_image=_str_env("HDYSSL_SSLYZE_IMAGE", cls.sslyze_image),
            sslscan_image=_str_env("HDYSSL_SSLSCAN_IMAGE", cls.sslscan_image),
            sslscan_repo=_str_env("HDYSSL_SSLSCAN_REPO", cls.sslscan_repo),
            sslscan_clone_dir=_str_env("HDYSSL_SSLSCAN_CLONE_DIR", cls.sslscan_clone_dir),
            output_dir=_str_env("HDYSSL_OUTPUT_DIR", cls.output_dir),
            log_level=_str_env("HDYSSL_LOG_LEVEL", cls.log_level).upper(),
        )


def load_settings() -> Settings:
    return Settings.from_env()
