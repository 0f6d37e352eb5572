from octosync.cli.app import main

main()
