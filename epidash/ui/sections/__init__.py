from .summary import render_summary
from .dynamics import render_age_timeseries, render_uncertainty
from .hospital import render_weekly_hospital, render_daily_hospital
from .age_breakdown import render_age_breakdown

__all__ = [
    "render_summary",
    "render_age_timeseries",
    "render_uncertainty",
    "render_weekly_hospital",
    "render_daily_hospital",
    "render_age_breakdown",
]
