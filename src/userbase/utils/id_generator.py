import uuid


def new_user_id() -> str:
    return str(uuid.uuid4())
