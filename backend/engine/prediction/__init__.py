"""Energy prediction from weather: efficiencies, load, target SOC, action."""

from .predictor import FALLBACK_PREDICTION, EfficiencyPredictor, EnergyPrediction

__all__ = ["FALLBACK_PREDICTION", "EfficiencyPredictor", "EnergyPrediction"]
