from __future__ import annotations  # Re-export jd_analysis public API

from .jd_analysis import JobData, fallback_job_data, parse_job_posting

__all__ = ["JobData", "fallback_job_data", "parse_job_posting"]
