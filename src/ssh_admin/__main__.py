from ssh_admin.cli import main

main()
