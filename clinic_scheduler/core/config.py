from pydantic_settings import BaseSettings, SettingsConfigDict

from clinic_scheduler.services.scheduling.topology import (
    DEFAULT_DAY_LABELS,
    DEFAULT_SLOTS,
    ShiftTopology,
    build_topology,
)
from clinic_scheduler.services.scheduling.types import SchedulingOptions


class Settings(BaseSettings):
    # App
    ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Shift grid (labels are display-only, ids stay D1A..)
    SHIFT_DAY_LABELS: list[str] = list(DEFAULT_DAY_LABELS)

    # Scheduling rules
    FILER_CAP: int = 2
    ROLE_MINIMUM: int = 1
    FILER_MIN_SHIFTS: int = 3
    PRIORITIZE_CONSECUTIVE: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def build_topology(self) -> ShiftTopology:
        return build_topology(self.SHIFT_DAY_LABELS, DEFAULT_SLOTS)

    def scheduling_options(self) -> SchedulingOptions:
        return SchedulingOptions(
            prioritize_consecutive=self.PRIORITIZE_CONSECUTIVE,
            role_minimum=self.ROLE_MINIMUM,
            filer_cap=self.FILER_CAP,
            filer_min_shifts=self.FILER_MIN_SHIFTS,
        )


settings = Settings()
