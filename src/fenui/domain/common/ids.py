from __future__ import annotations

from typing import NewType

CountryId = NewType("CountryId", int)
DishId = NewType("DishId", int)
BannerId = NewType("BannerId", int)
EventoId = NewType("EventoId", int)
UserId = NewType("UserId", int)
