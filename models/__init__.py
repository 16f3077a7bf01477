from .animal_record import AnimalRecord, animals_to_data

__all__ = [
    "AnimalRecord",
    "animals_to_data",
]
