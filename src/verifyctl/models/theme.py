from typing import Optional

from verifyctl.models.common import VerifyModel


class Theme(VerifyModel):
    """A branding theme registration."""

    id: Optional[str] = None
    name: str
    description: Optional[str] = None

    @classmethod
    def boilerplate(cls) -> "Theme":
        return cls(name="<theme name>", description="<description>")
