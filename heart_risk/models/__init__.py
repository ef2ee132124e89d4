from .base import RiskModelBase
from .gbdt_components import HeartRiskGBDT

__all__ = ['RiskModelBase', 'HeartRiskGBDT']
