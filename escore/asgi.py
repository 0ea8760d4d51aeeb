# ASGI-Einstieg: uvicorn escore.asgi:app
from escore.main import create_app

app = create_app()
