"""
PayMaster - Pydantic Schemas
"""
