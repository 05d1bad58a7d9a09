from rustitect.cli import app

app()
