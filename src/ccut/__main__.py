from ccut.cli import app

app(prog_name="ccut")
