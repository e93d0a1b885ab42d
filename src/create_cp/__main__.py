from create_cp import main

main()
