from sysreport.cli.main import cli

cli()
