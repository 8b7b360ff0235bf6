from threads_tools.agent.assistant import build_threads_agent
from threads_tools.agent.tools import create_agent_tools

__all__ = ["build_threads_agent", "create_agent_tools"]
