from fastapi import Depends

from clinic_scheduler.core.config import Settings, settings
from clinic_scheduler.services.scheduling import SchedulingOptions, ShiftTopology


def get_settings() -> Settings:
    return settings


def get_topology(app_settings: Settings = Depends(get_settings)) -> ShiftTopology:
    return app_settings.build_topology()


def get_scheduling_options(app_settings: Settings = Depends(get_settings)) -> SchedulingOptions:
    return app_settings.scheduling_options()
