# 📄 File: app/modules/weather_care/domain/services/seasonal_tips.py
# 🧭 Purpose (Layman Explanation):
# A short list of general plant care tips for the current time of year.
# 🧪 Purpose (Technical Summary):
# Fixed per-season tip table keyed by the Northern-hemisphere season of a timestamp.
# 🔗 Dependencies:
# weather_care domain models, recommendation_engine.season_for_month
# 🔄 Connected Modules / Calls From:
# weather_care_service.py (GET /weather-care/tips)

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from app.modules.weather_care.domain.models.weather import CarePriority, Season, SeasonalTip

from .recommendation_engine import season_for_month

_HIGH = CarePriority.HIGH
_MEDIUM = CarePriority.MEDIUM
_LOW = CarePriority.LOW

SEASONAL_TIPS: Dict[Season, List[SeasonalTip]] = {
    Season.SPRING: [
        SeasonalTip(title="Start Growing Season", description="Begin regular fertilizing as plants enter active growth", icon="🌱", priority=_HIGH),
        SeasonalTip(title="Repotting Time", description="Perfect time to repot plants that have outgrown their containers", icon="🪴", priority=_MEDIUM),
        SeasonalTip(title="Pruning", description="Prune dead or damaged growth to encourage new growth", icon="✂️", priority=_MEDIUM),
        SeasonalTip(title="Increase Watering", description="Plants will need more water as they start actively growing", icon="💧", priority=_HIGH),
    ],
    Season.SUMMER: [
        SeasonalTip(title="Consistent Watering", description="Monitor soil moisture closely and water consistently", icon="💧", priority=_HIGH),
        SeasonalTip(title="Provide Shade", description="Protect plants from intense afternoon sun", icon="🌳", priority=_MEDIUM),
        SeasonalTip(title="Regular Feeding", description="Feed plants regularly to support active growth", icon="🌿", priority=_MEDIUM),
        SeasonalTip(title="Pest Monitoring", description="Watch for increased pest activity in warm weather", icon="🔍", priority=_HIGH),
    ],
    Season.FALL: [
        SeasonalTip(title="Reduce Fertilizing", description="Gradually reduce feeding as plants prepare for dormancy", icon="🍂", priority=_MEDIUM),
        SeasonalTip(title="Harvest Seeds", description="Collect seeds from mature plants for next year", icon="🌾", priority=_LOW),
        SeasonalTip(title="Prepare for Winter", description="Start preparing tender plants for winter protection", icon="🏠", priority=_HIGH),
        SeasonalTip(title="Clean Up", description="Remove dead or diseased plant material", icon="🧹", priority=_MEDIUM),
    ],
    Season.WINTER: [
        SeasonalTip(title="Reduce Watering", description="Most plants need less water during dormant period", icon="💧", priority=_HIGH),
        SeasonalTip(title="Monitor Humidity", description="Indoor heating can reduce humidity - consider humidifiers", icon="💨", priority=_MEDIUM),
        SeasonalTip(title="No Fertilizing", description="Avoid fertilizing dormant plants", icon="🚫", priority=_HIGH),
        SeasonalTip(title="Plan for Spring", description="Research new plants and plan your spring garden", icon="📝", priority=_LOW),
    ],
}


def get_seasonal_tips(now: Optional[datetime] = None) -> Dict[str, Any]:
    """Return ``{"season", "tips"}`` for the season containing ``now``."""
    now = now or datetime.now(timezone.utc)
    season = season_for_month(now.month)
    return {
        "season": season,
        "tips": [tip.model_copy() for tip in SEASONAL_TIPS[season]],
    }
