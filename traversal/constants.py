class empty:
    def __bool__(self):
        return False


CONDITION_HOOK = "__traversal_condition__"
ENV_PREFIX = "TRAVERSAL_"
STRING_TYPES = (str, bytes, bytearray)
TRUTHY = frozenset({"1", "true", "yes", "on", "y", "t"})
FALSY = frozenset({"0", "false", "no", "off", "n", "f", ""})
