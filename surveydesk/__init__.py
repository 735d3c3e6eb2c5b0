"""SurveyDesk backend package."""
