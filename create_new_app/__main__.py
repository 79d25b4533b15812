from create_new_app.cli import main

main()
