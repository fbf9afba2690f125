from solar_lead_relay.tools.solar_api_client import SolarAPIClient, get_solar_insights
from solar_lead_relay.tools.webhook_client import send_to_webhook

__all__ = ["SolarAPIClient", "get_solar_insights", "send_to_webhook"]
