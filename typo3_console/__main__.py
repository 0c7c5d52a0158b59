from typo3_console import main

main()
