#!/usr/bin/env python
"""
Django's command-line utility for administrative tasks.

Vaga Board - Kanban de candidaturas
"""

import os
import sys


def main():
    """Run administrative tasks."""

    # Testes sempre com settings próprias (SQLite em memória, channel layer local)
    if len(sys.argv) > 1 and sys.argv[1] == 'test':
        os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.test')
    else:
        os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.development')

    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc

    # Comandos customizados do Vaga Board
    if len(sys.argv) > 1:
        command = sys.argv[1]

        # Comando de setup inicial
        if command == 'setup':
            print("🚀 Configurando Vaga Board...")

            print("📊 Aplicando migrações...")
            execute_from_command_line([sys.argv[0], 'migrate'])

            print("⚖️  Verificando ordens das colunas...")
            execute_from_command_line([sys.argv[0], 'rebalancear_colunas'])

            print("✅ Setup concluído!")
            return

        elif command == 'backup':
            print("💾 Criando backup do banco...")
            from datetime import datetime
            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            backup_file = f"backup_vaga_{timestamp}.json"
            execute_from_command_line([sys.argv[0], 'dumpdata', 'core', '--indent', '2', '--output', backup_file])
            print(f"✅ Backup criado: {backup_file}")
            return

    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
