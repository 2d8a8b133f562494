from grepemail.cli import main

main()
