"""Action and state space descriptions."""
