from stats_monitor.main import main

main()
