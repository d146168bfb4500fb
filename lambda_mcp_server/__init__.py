"""
Lambda MCP Server - Model Context Protocol server for AWS Lambda.

Exposes Lambda function management (deploy, update, describe, list, invoke,
delete) to AI assistants via MCP over stdio.
"""

__version__ = "1.0.0"
