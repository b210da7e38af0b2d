from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel


# === Startup snapshot ===


@dataclass(frozen=True)
class SystemInfo:
    hostname: str
    ip_address: str
    platform: str
    release: str
    architecture: str
    total_memory: str
    free_memory: str
    os_name: str


# === API Schemas ===


class TimeOut(BaseModel):
    time: str


class RandomNumberOut(BaseModel):
    randomNumber: int


class QuoteOut(BaseModel):
    quote: str


class MessageOut(BaseModel):
    message: str


class EnvKeysOut(BaseModel):
    keys: list[str]


class ErrorOut(BaseModel):
    error: str
