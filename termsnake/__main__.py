from termsnake.game import main

main()
