"""User registration request generator."""

from __future__ import annotations

from dataclasses import astuple, dataclass
from typing import Iterator

from regnet.generators.base import BaseGenerator


@dataclass
class UserRequestParams:
    """Arguments of one ``requestUser`` invocation."""

    name: str
    email: str
    phone: str
    national_id_number: str

    def as_args(self) -> tuple[str, ...]:
        return astuple(self)


class UserGenerator(BaseGenerator):
    """Generate synthetic user registration requests."""

    def generate(self) -> UserRequestParams:
        """Generate a single request.

        Returns
        -------
        UserRequestParams
            Generated request arguments.
        """
        name = self.fake.name()
        return UserRequestParams(
            name=name,
            email=self.fake.email(),
            phone=self.fake.numerify("+91 9#########"),
            # 12-digit national id, never starting with 0 or 1
            national_id_number=str(self.random.randint(2, 9)) + self.fake.numerify("###########"),
        )

    def generate_batch(self, count: int) -> Iterator[UserRequestParams]:
        """Generate multiple requests with distinct identities.

        Parameters
        ----------
        count : int
            Number of requests to generate.

        Yields
        ------
        UserRequestParams
            Generated request arguments.
        """
        seen: set[tuple[str, str]] = set()
        while len(seen) < count:
            params = self.generate()
            identity = (params.name, params.national_id_number)
            if identity in seen:
                continue
            seen.add(identity)
            yield params
