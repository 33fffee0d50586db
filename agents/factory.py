"""
Registry of the agents that can drive a run, and the `create_agent` helper
that builds one from the `agent` section of an experiment configuration.

Registering a new policy:
1. Subclass `AbstractAgent` and accept `action_space` as first argument.
2. Import the class here and add it to `AGENT_REGISTRY` under the name used
   in configuration files.
"""

from typing import Any, Dict, Optional, Type

from agents.abstractAgent import AbstractAgent
from agents.randomAgent import RandomAgent
from spaces.abstractSpace import AbstractSpace

# Configuration name -> agent class
AGENT_REGISTRY: Dict[str, Type[AbstractAgent]] = {
    "RandomAgent": RandomAgent,
}


def create_agent(
    name: str,
    action_space: AbstractSpace,
    params: Optional[Dict[str, Any]] = None,
) -> AbstractAgent:
    """
    Builds the registered agent `name` for the given action space.

    Args:
        name (str): A key of `AGENT_REGISTRY`.
        action_space (AbstractSpace): The action space of the environment
            (the compound space for a batched environment).
        params (Optional[Dict[str, Any]], optional): Constructor keyword
            arguments, usually `agent.params` from a YAML file. Defaults to None.

    Raises:
        ValueError: If `name` is not registered.
        TypeError: If `params` does not match the agent's constructor.

    Returns:
        AbstractAgent: The new agent.
    """
    agent_class = AGENT_REGISTRY.get(name)
    if agent_class is None:
        raise ValueError(
            f"Unknown agent name: '{name}'. "
            f"Registered agents: {sorted(AGENT_REGISTRY)}"
        )

    try:
        agent = agent_class(action_space=action_space, **(params or {}))
    except TypeError as e:
        # Usually a typo or a missing key in the agent.params section
        print(
            f"Error: could not instantiate agent '{name}' with parameters "
            f"{params or {}}. Compare them with {agent_class.__name__}.__init__. Details: {e}"
        )
        raise

    print(f"Successfully created agent: '{name}' for action space {action_space!r}")
    return agent
