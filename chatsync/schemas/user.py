from pydantic import BaseModel


class UserRef(BaseModel):
    """A participant as carried in the ``sender`` field of a frame."""

    id: str
    name: str = ""

    model_config = {"frozen": True, "coerce_numbers_to_str": True}
