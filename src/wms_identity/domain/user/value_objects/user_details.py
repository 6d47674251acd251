"""Descriptive profile data embedded in the User aggregate."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union


class Sex(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"


@dataclass(frozen=True)
class UserDetails:
    """Profile details of a user.

    Owned by exactly one User and has no identity of its own. The image is
    only populated when it was explicitly loaded or uploaded, see
    ``User.image_loaded``.
    """

    description: Optional[str] = None
    comment: Optional[str] = None
    phone_no: Optional[str] = None
    im_handle: Optional[str] = None
    office: Optional[str] = None
    department: Optional[str] = None
    sex: Optional[Sex] = None
    image: Optional[bytes] = None

    def __post_init__(self) -> None:
        if self.sex is not None and not isinstance(self.sex, Sex):
            object.__setattr__(self, "sex", Sex(self.sex))

    def with_updates(  # noqa: PLR0913
        self,
        description: Optional[str] = None,
        comment: Optional[str] = None,
        phone_no: Optional[str] = None,
        im_handle: Optional[str] = None,
        office: Optional[str] = None,
        department: Optional[str] = None,
        sex: Optional[Union[str, Sex]] = None,
    ) -> "UserDetails":
        changes = {
            "description": description,
            "comment": comment,
            "phone_no": phone_no,
            "im_handle": im_handle,
            "office": office,
            "department": department,
            "sex": Sex(sex) if sex is not None else None,
        }
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    def with_image(self, image: Optional[bytes]) -> "UserDetails":
        return replace(self, image=bytes(image) if image is not None else None)

    def __repr__(self) -> str:
        image_len = len(self.image) if self.image is not None else None
        return (
            f"UserDetails(department={self.department!r}, office={self.office!r}, "
            f"sex={self.sex}, image_bytes={image_len})"
        )
