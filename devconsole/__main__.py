from devconsole.cli.app import run

run()
