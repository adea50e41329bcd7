"""
Story Drafter: turns free-text model output into features and user stories.
"""
