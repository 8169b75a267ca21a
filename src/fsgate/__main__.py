from fsgate.cli import main

main()
