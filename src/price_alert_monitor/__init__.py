"""Price alert monitoring and push notification dispatch."""
