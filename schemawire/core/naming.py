def subject_name(topic: str, is_key: bool) -> str:
    """
    Registry subject for a topic, following the topic name strategy:
    "<topic>-key" for record keys and "<topic>-value" for record values.
    """
    return f"{topic}-key" if is_key else f"{topic}-value"
