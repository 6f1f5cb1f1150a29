from typing import Literal

Action = Literal["new", "build", "show", "clean"]
