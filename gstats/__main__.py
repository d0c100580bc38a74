from gstats.cli import main

main()
