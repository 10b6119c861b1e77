"""Application layer DTOs"""

from src.service.farm_visit.app.dto.farm_summary import FarmSummary

__all__ = ['FarmSummary']
