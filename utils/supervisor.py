"""Supervisor (invigilator) assignment: one teacher per hall."""
from utils.seating_errors import InsufficientTeachers


def assign_supervisors(hall_results, teachers):
    """Pair teachers[i] with hall_results[i] in input order.

    Sets ``supervisor`` on each HallResult and returns the list of pairs
    (hall name, teacher).
    """
    teachers = list(teachers)
    if len(teachers) < len(hall_results):
        raise InsufficientTeachers(len(hall_results), len(teachers))
    pairs = []
    for hall_result, teacher in zip(hall_results, teachers):
        hall_result.supervisor = teacher
        pairs.append((hall_result.hall.hall_name, teacher))
    return pairs
