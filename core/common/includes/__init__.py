"""
Domain functions for PlantOps.
"""

from core.common.includes import scheduler
from core.common.includes import corrective
from core.common.includes import dashboard
