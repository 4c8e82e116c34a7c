from uuid import uuid4


def new_tracking_id(namespace: str) -> str:
    return f"{namespace}_{uuid4()}"
