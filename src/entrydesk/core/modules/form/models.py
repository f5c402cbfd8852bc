from pydantic import BaseModel, Field


class RenderResult(BaseModel):
    """Outcome of rendering an application form."""

    success: bool
    file_name: str | None = Field(default=None, description="Generated file name, e.g. form_CAD-000001_1700000000000.png")
    file_path: str | None = Field(default=None, description="Public path of the generated file, e.g. /forms/<file_name>")
    message: str | None = Field(default=None, description="Failure reason")

    @classmethod
    def ok(cls, file_name: str) -> "RenderResult":
        return cls(success=True, file_name=file_name, file_path=f"/forms/{file_name}")

    @classmethod
    def failed(cls, message: str) -> "RenderResult":
        return cls(success=False, message=message)
