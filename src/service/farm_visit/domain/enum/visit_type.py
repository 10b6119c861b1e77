from enum import StrEnum


class VisitType(StrEnum):
    FARM = 'farm'
    GARDEN = 'garden'
