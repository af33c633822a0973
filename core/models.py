"""Data модели для Todo Manager с Pydantic валидацией"""
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class Todo(BaseModel):
    """Todo item as stored in todos.json.

    The schema is strict: unknown fields and implicit type coercions are
    rejected, so a hand-edited or corrupted file fails loudly on load.
    """
    model_config = ConfigDict(validate_assignment=True, extra='forbid', strict=True)

    id: int = Field(..., gt=0)
    description: str
    completed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация в словарь для JSON (порядок полей фиксирован)"""
        return self.model_dump(mode='json')

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Todo':
        return cls.model_validate(data)

    def __str__(self) -> str:
        mark = "✓" if self.completed else " "
        return f"[{mark}] {self.id}. {self.description}"


class LenientTodo(Todo):
    """Todo accepted from files written by other tools.

    Unknown fields are dropped and compatible types ("3" -> 3) coerced.
    """
    model_config = ConfigDict(validate_assignment=True, extra='ignore', strict=False)
