from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

class Analytics:
    """Simple analytics tracking"""
    
    @staticmethod
    def track_event(event_name: str, project_id: int = None, properties: dict = None):
        """Track a floor plan event (logged; no external collector yet)"""
        try:
            logger.info(f"Event: {event_name}", extra={
                "project_id": project_id,
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "properties": properties or {}
            })
        except Exception as e:
            logger.error(f"Analytics error: {str(e)}")

analytics = Analytics()
