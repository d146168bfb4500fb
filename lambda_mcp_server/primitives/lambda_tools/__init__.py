"""AWS Lambda management tools."""
