"""Pydantic schemas for `User` domain objects."""

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


ALLOWED_ROLES = {"user", "moderator", "admin"}
PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class UserBase(BaseModel):
	email: str
	name: str = Field(..., min_length=2, max_length=50)

	@field_validator("email")
	@classmethod
	def validate_email(cls, v: str) -> str:
		v = v.strip().lower()
		if not EMAIL_PATTERN.match(v):
			raise ValueError("Please provide a valid email")
		return v

	@field_validator("name")
	@classmethod
	def strip_name(cls, v: str) -> str:
		v = v.strip()
		if len(v) < 2:
			raise ValueError("Name must be between 2 and 50 characters")
		return v


class UserCreate(UserBase):
	password: str = Field(..., min_length=6)

	@field_validator("password")
	@classmethod
	def validate_password(cls, v: str) -> str:
		if not PASSWORD_PATTERN.match(v):
			raise ValueError(
				"Password must contain at least one lowercase letter, one uppercase letter, and one number"
			)
		return v

	model_config = ConfigDict(json_schema_extra={
		"example": {
			"email": "designer@example.com",
			"name": "Maya Lin",
			"password": "StrongPass1",
		}
	})


class UserUpdate(BaseModel):
	name: Optional[str] = Field(None, min_length=2, max_length=50)
	avatar: Optional[str] = None
	bio: Optional[str] = Field(None, max_length=500)
	role: Optional[str] = None
	is_active: Optional[bool] = None

	@field_validator("role")
	@classmethod
	def validate_role(cls, v: Optional[str]) -> Optional[str]:
		if v is None:
			return v
		if v not in ALLOWED_ROLES:
			raise ValueError(f"Role must be one of {sorted(ALLOWED_ROLES)}")
		return v


class UserResponse(BaseModel):
	id: int
	email: str
	name: str
	role: str
	avatar: Optional[str] = None
	bio: Optional[str] = None
	is_active: bool
	created_at: datetime

	model_config = ConfigDict(from_attributes=True)


class AuthorSummary(BaseModel):
	"""Public author info embedded in posts, comments and reviews."""
	id: int
	name: str
	avatar: Optional[str] = None

	model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
	user: UserResponse
	access_token: str
	token_type: str = "bearer"
