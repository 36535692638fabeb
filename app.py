"""WSGI entry point (`flask --app app run`)."""

from dotenv import load_dotenv

load_dotenv()

from app_factory import create_app

app = create_app()
