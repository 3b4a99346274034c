from brewer.cli.app import main

main()
