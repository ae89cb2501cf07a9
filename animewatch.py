from cli.main import animewatch_cli

if __name__ == '__main__':
    animewatch_cli()
