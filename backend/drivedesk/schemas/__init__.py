"""Pydantic request/response schemas for the DriveDesk API."""
