from flag_translator.main import main

main()
