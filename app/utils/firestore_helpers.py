"""
Firestore query helpers.

NOTE: firebase_admin still accepts positional where() arguments; the
keyword FieldFilter form only changes the deprecation warning. Keeping the
call in one place makes the eventual switch a one-line change.
"""


def where_filter(query, field_path: str, op_string: str, value):
    """
    Apply a single where-clause to a Firestore query or collection reference.

    Usage:
        query = where_filter(collection, "status", "==", "active")
        query = where_filter(query, "user_id", "==", user_id)
    """
    return query.where(field_path, op_string, value)
