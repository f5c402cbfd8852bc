from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Invalid age format: twelve", "type": "validation_error"},
                {"message": "TFI ID card number already exists", "type": "validation_error"},
                {"message": "Form rendering timed out for CAD-000042", "type": "rendering_error"},
                {
                    "message": "Could not allocate a unique entry ID after 3 attempts, please retry",
                    "type": "identifier_collision_exhausted",
                },
            ]
        }
    }
