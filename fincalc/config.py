from decimal import Decimal

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "FINCALC_"}

    # Decimal substrate (read once at startup, never mutated)
    decimal_precision: int = 20
    display_places: int = 2

    # Newton-Raphson root finder
    solver_max_iterations: int = 100
    solver_tolerance: Decimal = Decimal("0.0000001")
    solver_step: Decimal = Decimal("0.0001")
    solver_initial_guess: Decimal = Decimal("0.1")

    # Calculator defaults
    periods_per_year: int = 12

    # App
    debug: bool = False
    log_level: str = "INFO"

    @field_validator("decimal_precision")
    @classmethod
    def _min_precision(cls, v: int) -> int:
        if v < 12:
            raise ValueError("decimal_precision must be at least 12 significant digits")
        return v


settings = Settings()
