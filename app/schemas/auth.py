"""Pydantic schemas for authentication endpoints."""

from pydantic import BaseModel, EmailStr, Field

PASSWORD_MIN_LENGTH = 6


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1, max_length=256)
    email: EmailStr
    password: str = Field(min_length=PASSWORD_MIN_LENGTH)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class TokenResponse(BaseModel):
    token: str


class PasswordResetRequest(BaseModel):
    email: EmailStr


class PasswordResetConfirmRequest(BaseModel):
    token: str = Field(min_length=1)
    new_password: str = Field(min_length=PASSWORD_MIN_LENGTH)


class MessageResponse(BaseModel):
    message: str
