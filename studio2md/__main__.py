from studio2md.cli import app

app()
