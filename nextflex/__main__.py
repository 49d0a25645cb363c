from nextflex.cli import main

main()
