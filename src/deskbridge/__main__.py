from deskbridge.cli import app

app()
