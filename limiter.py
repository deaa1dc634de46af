from slowapi import Limiter
from slowapi.util import get_remote_address

# Shared by app.py and router.py so decorators and app state see one instance.
limiter = Limiter(key_func=get_remote_address)
