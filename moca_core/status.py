import json
from dataclasses import dataclass

from .errors import MalformedStatusError

MOCA_STATUS_INDEX = 2


@dataclass(frozen=True)
class UserbarStatus:
    """Ответ ajaxSet_userbar.php. В mainStatus третий элемент - состояние MoCA."""
    main_status: list

    @classmethod
    def from_json(cls, text: str) -> "UserbarStatus":
        try:
            payload = json.loads(text)
        except ValueError as e:
            raise MalformedStatusError(f"not JSON: {e}") from e
        return cls.from_payload(payload)

    @classmethod
    def from_payload(cls, payload) -> "UserbarStatus":
        if not isinstance(payload, dict):
            raise MalformedStatusError("expected a JSON object")

        main_status = payload.get('mainStatus')
        if not isinstance(main_status, list):
            raise MalformedStatusError("mainStatus is missing or not a list")
        if len(main_status) <= MOCA_STATUS_INDEX:
            raise MalformedStatusError(f"mainStatus has {len(main_status)} entries")

        return cls(main_status=main_status)

    @property
    def moca_enabled(self) -> bool:
        return self.main_status[MOCA_STATUS_INDEX] == "true"
