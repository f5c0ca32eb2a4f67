# trick_trainer/__init__.py
"""Rules engine, training prompts and self-play tooling for a trick-taking trainer."""
