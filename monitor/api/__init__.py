"""Sleep-data provider clients."""
from monitor.api.oura import OuraClient, sleep_window
