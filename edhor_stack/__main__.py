from edhor_stack.cli import main

main()
