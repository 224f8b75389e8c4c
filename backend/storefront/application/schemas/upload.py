from pydantic import BaseModel


class UploadResponse(BaseModel):
    """Location of an image stored on the external asset host."""

    url: str
    public_id: str
