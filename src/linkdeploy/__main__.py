from linkdeploy.cli.app import app

app()
