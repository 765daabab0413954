from issame.cli.main import cli

cli()
