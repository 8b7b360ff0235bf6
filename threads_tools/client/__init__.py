from threads_tools.client.graph import GraphClient

__all__ = ["GraphClient"]
