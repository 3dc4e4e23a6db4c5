# countries_api/config.py
from __future__ import annotations
import argparse
import os
from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 8080
    seed: Optional[str] = None
    log_level: str = "INFO"
    log_file: Optional[str] = None


def parse_args(argv: Optional[Sequence[str]] = None) -> Settings:
    """Build Settings from CLI flags, falling back to COUNTRIES_* env vars."""
    env = os.environ
    p = argparse.ArgumentParser(description="In-memory countries REST API")
    p.add_argument("-H", "--host", default=env.get("COUNTRIES_HOST", Settings.host))
    p.add_argument("-p", "--port", type=int, default=int(env.get("COUNTRIES_PORT", Settings.port)))
    p.add_argument("--seed", default=env.get("COUNTRIES_SEED"),
                   help="JSON file with an array of countries to load at startup")
    p.add_argument("--log-level", default=env.get("COUNTRIES_LOG_LEVEL", Settings.log_level))
    p.add_argument("--log-file", default=env.get("COUNTRIES_LOG_FILE"))
    a = p.parse_args(argv)
    return Settings(
        host=a.host,
        port=a.port,
        seed=a.seed,
        log_level=a.log_level,
        log_file=a.log_file,
    )
