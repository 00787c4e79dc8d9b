from pydantic import BaseModel
from typing import List

class Transformation(BaseModel):
    name: str
    effect: str
    description: str

class TransformationListResponse(BaseModel):
    transformations: List[Transformation] = []

class TransformResponse(BaseModel):
    url: str

class ErrorResponse(BaseModel):
    statusCode: int
    message: str
    error: str

class UpstreamHealthResponse(BaseModel):
    configured: bool
    message: str
