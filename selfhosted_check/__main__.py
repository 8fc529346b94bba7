from selfhosted_check.cli.main import cli

cli()
