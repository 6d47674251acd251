"""User aggregate: identity, profile, roles, preferences and password history."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Union

from wms_identity.domain.shared.time import utc_now
from wms_identity.domain.user.exceptions import InvalidArgumentError
from wms_identity.domain.user.value_objects import (
    Role,
    Sex,
    UserDetails,
    UserKind,
    UserPassword,
    UserPreference,
)

SYSTEM_USER_FULLNAME = "System User"


class User:
    """
    User aggregate root.

    A user is identified by its username. It is *new* until the repository
    assigns a persistent ``id`` on the first save and *removed* once the
    repository deleted it. The password history is append-only; the last
    entry is the current password.
    """

    def __init__(  # noqa: PLR0913
        self,
        username: str,
        fullname: Optional[str] = None,
        enabled: bool = True,
        external_user: bool = False,
        details: Optional[UserDetails] = None,
        roles: Iterable[Role] = (),
        preferences: Iterable[UserPreference] = (),
        password_history: Iterable[UserPassword] = (),
        kind: Union[str, UserKind] = UserKind.REGULAR,
        id: Optional[int] = None,
        image_loaded: bool = True,
        last_password_change: Optional[datetime] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        if not username or not username.strip():
            msg = "Username cannot be empty"
            raise InvalidArgumentError(msg)

        self._username = username.strip()
        self._fullname = fullname
        self._enabled = enabled
        self._external_user = external_user
        self._details = details or UserDetails()
        self._roles: set[Role] = set(roles)
        self._preferences: dict[str, UserPreference] = {}
        for preference in preferences:
            self.set_preference(preference)
        self._password_history: list[UserPassword] = sorted(
            password_history,
            key=lambda p: p.created_at,
        )
        self._kind = kind if isinstance(kind, UserKind) else UserKind(kind)
        self._id = id
        self._image_loaded = image_loaded
        self._removed = False
        self._last_password_change = last_password_change
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    # ------------------------------------------------------------------
    # Identity and lifecycle
    # ------------------------------------------------------------------

    @property
    def id(self) -> Optional[int]:
        return self._id

    @property
    def username(self) -> str:
        return self._username

    @property
    def kind(self) -> UserKind:
        return self._kind

    @property
    def is_system_user(self) -> bool:
        return self._kind == UserKind.SYSTEM

    @property
    def is_new(self) -> bool:
        """True while the user has no persistent identity."""
        return self._id is None

    @property
    def is_removed(self) -> bool:
        return self._removed

    def mark_persisted(self, id: int) -> None:
        """Record the identity the repository assigned on first save."""
        if self._id is not None and self._id != id:
            msg = f"User {self._username} is already persisted with id {self._id}"
            raise InvalidArgumentError(msg)
        self._id = id

    def mark_removed(self) -> None:
        self._id = None
        self._removed = True

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    @property
    def fullname(self) -> Optional[str]:
        return self._fullname

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def external_user(self) -> bool:
        return self._external_user

    @property
    def details(self) -> UserDetails:
        return self._details

    def update_profile(
        self,
        fullname: Optional[str] = None,
        enabled: Optional[bool] = None,
        external_user: Optional[bool] = None,
    ) -> None:
        if fullname is not None:
            self._fullname = fullname
        if enabled is not None:
            self._enabled = enabled
        if external_user is not None:
            self._external_user = external_user
        self._touch()

    def update_details(  # noqa: PLR0913
        self,
        description: Optional[str] = None,
        comment: Optional[str] = None,
        phone_no: Optional[str] = None,
        im_handle: Optional[str] = None,
        office: Optional[str] = None,
        department: Optional[str] = None,
        sex: Optional[Union[str, Sex]] = None,
    ) -> None:
        self._details = self._details.with_updates(
            description=description,
            comment=comment,
            phone_no=phone_no,
            im_handle=im_handle,
            office=office,
            department=department,
            sex=sex,
        )
        self._touch()

    # ------------------------------------------------------------------
    # Image (loaded on demand)
    # ------------------------------------------------------------------

    @property
    def image(self) -> Optional[bytes]:
        return self._details.image

    @property
    def image_loaded(self) -> bool:
        """False when the image was left in the store and not fetched."""
        return self._image_loaded

    def upload_image(self, image: bytes) -> None:
        if image is None:
            msg = "Image cannot be None"
            raise InvalidArgumentError(msg)
        self._details = self._details.with_image(image)
        self._image_loaded = True
        self._touch()

    def attach_loaded_image(self, image: Optional[bytes]) -> None:
        """Set the image read from the store without marking a change."""
        self._details = self._details.with_image(image)
        self._image_loaded = True

    # ------------------------------------------------------------------
    # Roles
    # ------------------------------------------------------------------

    @property
    def roles(self) -> frozenset[Role]:
        return frozenset(self._roles)

    def assign_role(self, role: Role) -> None:
        if self.is_system_user and role not in self._roles:
            msg = "The system user carries exactly one role"
            raise InvalidArgumentError(msg)
        self._roles.add(role)
        self._touch()

    def revoke_role(self, role: Role) -> None:
        if self.is_system_user:
            msg = "The system user carries exactly one role"
            raise InvalidArgumentError(msg)
        self._roles.discard(role)
        self._touch()

    # ------------------------------------------------------------------
    # Preferences
    # ------------------------------------------------------------------

    @property
    def preferences(self) -> tuple[UserPreference, ...]:
        return tuple(self._preferences[k] for k in sorted(self._preferences))

    def get_preference(self, key: str) -> Optional[UserPreference]:
        return self._preferences.get(key)

    def set_preference(self, preference: UserPreference) -> UserPreference:
        """Attach a preference to this user, replacing one with the same key."""
        owned = preference.owned_by(self._username)
        self._preferences[owned.key] = owned
        return owned

    def remove_preference(self, key: str) -> bool:
        return self._preferences.pop(key, None) is not None

    # ------------------------------------------------------------------
    # Password history
    # ------------------------------------------------------------------

    @property
    def password_history(self) -> tuple[UserPassword, ...]:
        return tuple(self._password_history)

    @property
    def current_password(self) -> Optional[UserPassword]:
        return self._password_history[-1] if self._password_history else None

    @property
    def last_password_change(self) -> Optional[datetime]:
        return self._last_password_change

    def record_password(self, credential: UserPassword) -> None:
        """Append an accepted credential to the history.

        Only the password history policy decides whether a credential is
        acceptable; this method performs no reuse check.
        """
        if credential.username != self._username:
            msg = (
                f"Password of user {credential.username} cannot be recorded "
                f"for user {self._username}"
            )
            raise InvalidArgumentError(msg)
        self._password_history.append(credential)
        self._last_password_change = credential.created_at
        self._touch()

    def mark_password_persisted(self, credential: UserPassword, id: int) -> None:
        """Record the identity the repository assigned to a history entry."""
        for index, entry in enumerate(self._password_history):
            if entry is credential:
                self._password_history[index] = entry.with_id(id)
                return

    def discard_unsaved_passwords(self) -> int:
        """Drop history entries that were never stored and return their count."""
        kept = [entry for entry in self._password_history if not entry.is_new]
        discarded = len(self._password_history) - len(kept)
        if discarded:
            self._password_history = kept
            self._last_password_change = kept[-1].created_at if kept else None
        return discarded

    # ------------------------------------------------------------------
    # Merging
    # ------------------------------------------------------------------

    def merge_from(self, other: User) -> None:
        """Copy the profile state of a detached or transient copy onto self.

        Identity and password history of ``self`` are kept; the history of
        ``other`` is ignored, since only the password history policy appends
        to it. Preferences of ``other`` are added (same keys replaced). Roles
        are replaced only when ``other`` carries any. The image is copied only
        when ``other`` holds one.
        """
        if other.username != self._username:
            msg = f"Cannot merge user {other.username} into {self._username}"
            raise InvalidArgumentError(msg)

        self._fullname = other.fullname
        self._enabled = other.enabled
        self._external_user = other.external_user

        image = self._details.image
        image_loaded = self._image_loaded
        if other.image_loaded and other.image is not None:
            image = other.image
            image_loaded = True
        self._details = other.details.with_image(image)
        self._image_loaded = image_loaded

        if other.roles and not self.is_system_user:
            self._roles = set(other.roles)
        for preference in other.preferences:
            self.set_preference(preference)
        self._touch()

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def create(cls, username: str, fullname: Optional[str] = None) -> User:
        return cls(username=username, fullname=fullname)

    @classmethod
    def create_system_user(cls, username: str, role: Role) -> User:
        return cls(
            username=username,
            fullname=SYSTEM_USER_FULLNAME,
            roles=[role],
            kind=UserKind.SYSTEM,
        )

    @classmethod
    def reconstitute(  # noqa: PLR0913
        cls,
        id: int,
        username: str,
        fullname: Optional[str],
        enabled: bool,
        external_user: bool,
        details: UserDetails,
        roles: Iterable[Role],
        preferences: Iterable[UserPreference],
        password_history: Iterable[UserPassword],
        kind: Union[str, UserKind],
        image_loaded: bool,
        last_password_change: Optional[datetime],
        created_at: datetime,
        updated_at: datetime,
    ) -> User:
        return cls(
            id=id,
            username=username,
            fullname=fullname,
            enabled=enabled,
            external_user=external_user,
            details=details,
            roles=roles,
            preferences=preferences,
            password_history=password_history,
            kind=kind,
            image_loaded=image_loaded,
            last_password_change=last_password_change,
            created_at=created_at,
            updated_at=updated_at,
        )

    def _touch(self) -> None:
        self._updated_at = utc_now()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._username == other._username

    def __hash__(self) -> int:
        return hash(self._username)

    def __repr__(self) -> str:
        return (
            f"User(id={self._id}, username={self._username}, "
            f"kind={self._kind.value})"
        )
