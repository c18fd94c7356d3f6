from dataclasses import dataclass
from typing import Dict, List, Union

USER_COUNT = 1000
USER_AGE = 25
FRAMEWORK_LABEL = "Golang (fiber)  "

FIRST_NAME_PREFIX = "First_name"
LAST_NAME_PREFIX = "Last_Name"


@dataclass(frozen=True)
class User:
    id: int
    age: int
    first_name: str
    last_name: str
    framework: str

    def to_dict(self) -> Dict[str, Union[int, str]]:
        # Wire names and order are part of the response contract
        return {
            "Id": self.id,
            "Age": self.age,
            "First_Name": self.first_name,
            "Last_Name": self.last_name,
            "Framework": self.framework,
        }


def generate_users(count: int = USER_COUNT, start: int = 0, framework: str = FRAMEWORK_LABEL) -> List[User]:
    """Build `count` records with contiguous ids beginning at `start`."""
    users = []
    for i in range(start, start + count):
        index = str(i)
        users.append(
            User(
                id=i,
                age=USER_AGE,
                first_name=FIRST_NAME_PREFIX + index,
                last_name=LAST_NAME_PREFIX + index,
                framework=framework,
            )
        )
    return users
