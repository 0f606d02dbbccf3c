"""RoboQuest API: progress, gamification and content catalog for kids' coding lessons."""
